### Merge the clip tracks and their links into gpxFiles/final.gpx.
###
### Files are ordered by the number their name starts with:
### 0.gpx, 0To1.gpx, 1.gpx, 1To2.gpx, 2.gpx, ...
### A plain clip track comes before the link that starts at the same clip.

import os
import os.path
import re
import subprocess

import gpxpy.parser as gpxParser

FINAL_NAME = 'final.gpx'

_INTEGER = re.compile(r'^[+-]?\d+$')


def resolveOrderKey(fileName):
    """
    Leading number of a GPX file name, as (numeral, wasExact).
    '12.gpx' -> (12, True).  Names that aren't a plain integer lose
    trailing characters until what is left parses:
    '3To4.gpx' -> (3, False); no digits at all -> (0, False).
    """
    name = fileName[:-len('.gpx')] if fileName.endswith('.gpx') else fileName
    if _INTEGER.match(name):
        return int(name), True
    while name:
        name = name[:-1]
        if _INTEGER.match(name):
            return int(name), False
    return 0, False


def mergeOrderKey(path):
    """Sort key: numeral, then exact names before truncated ones, then name, then path."""
    fn = os.path.basename(path)
    numeral, wasExact = resolveOrderKey(fn)
    return (numeral, not wasExact, fn, path)


def mergeOrder(fileNames):
    """
    Merge order of file names or paths.  Only the file name counts;
    equal names in different folders are all kept, ordered by path.
    """
    return sorted(fileNames, key=mergeOrderKey)


def removeFinal(gpxDir):
    # left over from a previous run
    finalFile = os.path.join(gpxDir, FINAL_NAME)
    if os.path.isfile(finalFile):
        os.remove(finalFile)


def mergeTracks(fileNames, outFileName):
    """
    Concatenate the tracks of fileNames, in the order given, into
    outFileName.  The first file is the base; every track of the
    following files is appended to it.
    """
    if len(fileNames) == 0:
        raise ValueError("gpxMerge.mergeTracks: need at least one file to work with!")
    gpxes = []
    for fn in fileNames:
        with open(fn, 'r') as f:
            parser = gpxParser.GPXParser(f)
            parser.parse()
            gpxes.append(parser.gpx)
    out = gpxes[0]
    for gpx in gpxes[1:]:
        for track in gpx.tracks:
            out.tracks.append(track)
    output = out.to_xml()
    with open(outFileName, 'w') as f:
        f.write(output)
    return out


def mergeFiles(fileNames, outFileName):
    """Merge GPX files given in any order (paths may share a file name)."""
    return mergeTracks(mergeOrder(fileNames), outFileName)


def runMergeCommand(mergeCommand, fileNames, outFileName):
    """External merger, called as: mergeCommand -o outFileName file1 file2 ..."""
    cmd = [mergeCommand, '-o', outFileName] + list(fileNames)
    try:
        subprocess.run(cmd, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise RuntimeError('gpxMerge: %s failed: %s' % (mergeCommand, e)) from e


def mergeFinal(gpxDir, mergeCommand=None, report=None):
    """
    Merge every GPX file of gpxDir into gpxDir/final.gpx.
    With mergeCommand (e.g. the path to gpxmerge) the merge is done
    by that program, otherwise in-process with gpxpy.
    Returns the path of final.gpx.
    """
    removeFinal(gpxDir)
    fileNames = mergeOrder([fn for fn in os.listdir(gpxDir) if fn.endswith('.gpx')])
    if len(fileNames) == 0:
        raise ValueError('gpxMerge.mergeFinal: no GPX files in %s' % gpxDir)
    finalFile = os.path.join(gpxDir, FINAL_NAME)
    open(finalFile, 'w').close()
    paths = []
    for fn in fileNames:
        if report is not None:
            report.info(fn)
        paths.append(os.path.join(gpxDir, fn))
    if mergeCommand:
        runMergeCommand(mergeCommand, paths, finalFile)
    else:
        mergeTracks(paths, finalFile)
    return finalFile
