from compression_eval.cli import main

raise SystemExit(main())
