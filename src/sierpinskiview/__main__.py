"""
Run with: python -m sierpinskiview
"""
import sys

from sierpinskiview.main import main

if __name__ == "__main__":
    sys.exit(main())
