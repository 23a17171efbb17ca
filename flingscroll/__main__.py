from flingscroll.runtime.entrypoint import main

raise SystemExit(main())
