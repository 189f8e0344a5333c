class DisplayConfig:
    # Session markers
    KDE_SESSION_ENV = "KDE_FULL_SESSION"
    DESKTOP_ENVS = ("XDG_CURRENT_DESKTOP", "XDG_SESSION_DESKTOP")
    GNOME_DESKTOP = "GNOME"

    # Query tools
    JSON_TOOL = "jq"
    KSCREEN_TOOL = "kscreen-doctor"
    XRANDR_TOOL = "xrandr"
    GSETTINGS_TOOL = "gsettings"

    KSCREEN_QUERY = (KSCREEN_TOOL, "-j")
    XRANDR_QUERY = (XRANDR_TOOL, "--query")
    GNOME_FEATURES_QUERY = (GSETTINGS_TOOL, "get", "org.gnome.mutter", "experimental-features")

    # Mutter experimental-feature strings
    GNOME_HDR_FEATURE = "hdr"
    GNOME_VRR_FEATURE = "variable-refresh-rate"

    # kscreen vrrPolicy codes: 0 never, 1 always, 2 automatic
    KDE_VRR_ENABLED = (1, 2)

    DEFAULT_REFRESH_RATE = 60.0

    # Arch package names, used in missing-dependency hints
    PACKAGE_MAP = {
        "jq": "jq",
        "kscreen-doctor": "libkscreen",
        "xrandr": "xorg-xrandr",
        "gsettings": "glib2",
        "gamescope": "gamescope",
    }
