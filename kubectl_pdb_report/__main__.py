import sys

from kubectl_pdb_report.cli import main

sys.exit(main())
