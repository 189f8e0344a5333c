"""Unit tests for gamescope option-string editing"""

import pytest

from gslaunch.args import (
    ArgumentSet,
    append_if_absent,
    first_output,
    replace_or_append,
    set_flag,
)


class TestAppendIfAbsent:
    """Test literal-flag appends"""

    def test_appends_missing_flag(self):
        assert append_if_absent("-f --mangoapp", "--hdr-enabled") == "-f --mangoapp --hdr-enabled"

    def test_present_flag_leaves_string_unchanged(self):
        assert append_if_absent("-f --hdr-enabled -W 1920", "--hdr-enabled") == "-f --hdr-enabled -W 1920"

    @pytest.mark.parametrize("args", ["", "-f", "-W 2560 -H 1440 --mangoapp"])
    def test_idempotent(self, args):
        once = append_if_absent(args, "--adaptive-sync")
        assert "--adaptive-sync" in once
        assert append_if_absent(once, "--adaptive-sync") == once

    def test_empty_string_has_no_leading_space(self):
        assert append_if_absent("", "-f") == "-f"


class TestReplaceOrAppend:
    """Test pattern-based replacement"""

    def test_replaces_single_match_only(self):
        result = replace_or_append("-f -W 1920 --mangoapp", r"-W \d+", "-W 3440")
        assert result == "-f -W 3440 --mangoapp"

    def test_appends_when_pattern_absent(self):
        assert replace_or_append("-f --mangoapp", r"-W \d+", "-W 2560") == "-f --mangoapp -W 2560"

    def test_replacement_is_literal(self):
        assert replace_or_append("-F fsr", r"-F \S+", r"-F \1") == r"-F \1"

    def test_empty_string(self):
        assert replace_or_append("", r"-H \d+", "-H 1440") == "-H 1440"


class TestSetFlag:
    """Test flag-addressed replacement"""

    def test_replaces_value_in_place(self):
        assert set_flag("-W 1920 -f", "-W", 3440) == "-W 3440 -f"

    def test_appends_when_absent(self):
        assert set_flag("-f --mangoapp", "-W", 2560) == "-f --mangoapp -W 2560"

    def test_long_alias_is_replaced(self):
        assert set_flag("--output-width 1920 -f", "-W", 2560) == "--output-width 2560 -f"

    def test_joined_value_is_replaced(self):
        assert set_flag("-f --output-width=1920", "-W", 2560) == "-f --output-width=2560"

    def test_duplicates_collapse_to_one(self):
        result = set_flag("-W 1280 -f --output-width 1920", "-W", 3440)
        assert result == "-W 3440 -f"
        assert "1920" not in result

    def test_does_not_touch_similar_flags(self):
        assert set_flag("-w 1280 -h 720", "-W", 2560) == "-w 1280 -h 720 -W 2560"


class TestArgumentSet:
    """Test the ordered flag model"""

    def test_parse_pairs_flags_with_values(self):
        args = ArgumentSet.parse("-f --mangoapp -W 1920 -r 60")
        assert [(e.flag, e.value) for e in args] == [
            ("-f", None),
            ("--mangoapp", None),
            ("-W", "1920"),
            ("-r", "60"),
        ]

    def test_round_trip_preserves_order(self):
        text = "-e -f -W 2560 -H 1440 --adaptive-sync"
        assert str(ArgumentSet.parse(text)) == text

    def test_negative_number_is_a_value(self):
        args = ArgumentSet.parse("--hdr-sdr-content-nits -5 -f")
        assert args.get("--hdr-sdr-content-nits") == "-5"
        assert args.has("-f")

    def test_quoted_value_survives(self):
        args = ArgumentSet.parse(["-T", "/tmp/my stats"])
        assert args.tokens() == ["-T", "/tmp/my stats"]
        assert str(args) == "-T '/tmp/my stats'"

    def test_get_by_alias(self):
        args = ArgumentSet.parse("--prefer-output DP-1,HDMI-A-1")
        assert args.get("-O") == "DP-1,HDMI-A-1"

    def test_append_if_absent_respects_alias(self):
        args = ArgumentSet.parse("--fullscreen")
        args.append_if_absent("-f")
        assert str(args) == "--fullscreen"

    def test_copy_is_independent(self):
        args = ArgumentSet.parse("-W 1920")
        clone = args.copy()
        clone.set("-W", "2560")
        assert args.get("-W") == "1920"

    def test_empty(self):
        assert not ArgumentSet.parse("")
        assert ArgumentSet.parse(None).tokens() == []


class TestFirstOutput:
    """Test preferred-output list parsing"""

    def test_first_of_list(self):
        assert first_output("DP-1,HDMI-A-1") == "DP-1"

    def test_single(self):
        assert first_output("eDP-1") == "eDP-1"

    @pytest.mark.parametrize("value", [None, "", " , "])
    def test_empty(self, value):
        assert first_output(value) is None
