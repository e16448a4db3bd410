import sys

from keyframe_mosaic.cli import main


sys.exit(main())
