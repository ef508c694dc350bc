from commit_lint.app import main

raise SystemExit(main())
