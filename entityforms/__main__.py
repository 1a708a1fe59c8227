import sys

from entityforms.app.main import main

sys.exit(main())
