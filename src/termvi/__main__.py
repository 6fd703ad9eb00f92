from termvi.cli import main

raise SystemExit(main())
