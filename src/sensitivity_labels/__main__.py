import sys

from sensitivity_labels.cli import main

sys.exit(main())
