import sys

from cloudinary_gallery.main import main

sys.exit(main())
