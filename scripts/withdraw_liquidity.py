import os
import sys

from fury_sdk.cli import withdraw_main

if len(sys.argv) > 1:
    os.environ["FURY_NETWORK"] = sys.argv[1]

withdraw_main()
