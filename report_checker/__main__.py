import sys

from report_checker.main import main

sys.exit(main())
