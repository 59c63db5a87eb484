import os
import sys

from fury_sdk.cli import main

# python scripts/deploy_fury.py [localterra|bombay-12|juno-testing]
if len(sys.argv) > 1:
    os.environ["FURY_NETWORK"] = sys.argv[1]

main()
