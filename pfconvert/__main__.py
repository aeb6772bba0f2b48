import sys

from pfconvert.convert import main

if __name__ == '__main__':
    sys.exit(main())
