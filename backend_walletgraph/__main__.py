from backend_walletgraph.cli import main

raise SystemExit(main())
