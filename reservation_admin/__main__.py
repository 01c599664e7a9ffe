from reservation_admin.cli import main

raise SystemExit(main())
