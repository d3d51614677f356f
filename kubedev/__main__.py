import sys

from kubedev.app import main

sys.exit(main())
