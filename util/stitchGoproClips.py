#!/usr/bin/env python

### Usage: stitchGoproClips.py parms.yaml [--skip-extraction]
### See GPXstitch/stitchParms.py for the parameter file.

from GPXstitch import goproRoute, readParmFile
import sys

if __name__=="__main__":
    args=[a for a in sys.argv[1:] if a != '--skip-extraction']
    if len(args) != 1:
        print("Usage: ", sys.argv[0], " parmFile [--skip-extraction]")
        sys.exit(1)
    parms=readParmFile(args[0])
    print('begin')
    report=goproRoute(parms, skipExtraction='--skip-extraction' in sys.argv[1:])
    report.printSummary()
    print('done')
