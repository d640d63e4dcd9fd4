#!/usr/bin/env python

from GPXstitch import gpxMerge
import sys
import os

if __name__=="__main__":
    if len(sys.argv) < 4:
        print("Usage: ", sys.argv[0], " outputFileName inputFiles")
        sys.exit(1)
    outputFileName=sys.argv[1]
    if os.path.isfile(outputFileName):
        print(outputFileName, "already exists")
        sys.exit(1)
    inputFiles=[]
    for f in sys.argv[2:]:
        if not os.path.isfile(f):
            print("No such file:", f)
            sys.exit(1)
        inputFiles.append(f)
    # same order as the stitcher: 0.gpx, 0To1.gpx, 1.gpx, ...
    gpxMerge.mergeFiles(inputFiles, outputFileName)
    print('done')
