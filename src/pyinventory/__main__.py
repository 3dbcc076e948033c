from pyinventory.cli import main

raise SystemExit(main())
