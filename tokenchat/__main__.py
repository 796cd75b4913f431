import sys

from tokenchat.main import main

sys.exit(main())
