import sys

from audio_defects.cli import main

sys.exit(main())
