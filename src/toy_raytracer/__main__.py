import sys

from toy_raytracer.cli import main

sys.exit(main())
