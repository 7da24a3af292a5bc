import sys

from project_updater.pipeline import main

sys.exit(main())
