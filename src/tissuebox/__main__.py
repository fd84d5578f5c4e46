"""Allow ``python -m tissuebox``; also the clipboard owner's entry point."""

import sys

from tissuebox.app import main

sys.exit(main())
