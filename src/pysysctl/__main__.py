import sys

from pysysctl.sysctl import main

sys.exit(main(["pysysctl", *sys.argv[1:]]))
