from gslaunch.cli import main

raise SystemExit(main())
