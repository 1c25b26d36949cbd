from tripanalyzer.durations.analyze_trips_cli import main

raise SystemExit(main())
