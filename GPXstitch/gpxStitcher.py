### Gap stitcher: decides which clip boundaries get a routed link.
###
### Every clip boundary is a potential discontinuity (camera switched off,
### GPS lost).  Walking the clip tracks in order, the last valid point of
### the previous clip is linked to the first point of the next clip that
### has points.  Tracks without a usable fix are skipped, so a short dead
### clip doesn't produce a near-zero-length link.

from collections import namedtuple
import os
import os.path
import re

from .gpxTrack import DEFAULT_POINT, isDefaultPoint, isZeroFix, readTrack
from .runReport import runReport

GPX_SUFFIX = '.gpx'
RESERVED_MARKERS = ('To', 'final')  # links and merge output

_INDEX_NAME = re.compile(r'^[+-]?\d+$')

# lastPoint: end of the last track that had a valid fix
# bufferedName: file the next link starts from
# linked: files already used as the end of a link
# established: lastPoint holds a real coordinate
stitchState = namedtuple('stitchState', ['lastPoint', 'bufferedName', 'linked', 'established'])

INITIAL_STATE = stitchState(DEFAULT_POINT, None, frozenset(), False)


def stem(fileName):
    if fileName.endswith(GPX_SUFFIX):
        return fileName[:-len(GPX_SUFFIX)]
    return fileName


def isReserved(fileName):
    return any(marker in fileName for marker in RESERVED_MARKERS)


def buildTrackIndex(gpxDir):
    """
    List the per-clip tracks <i>.gpx in gpxDir, sorted by i.
    Returns a list of (i, fileName).  Links and final.gpx from an
    earlier pass are left out; any other name that isn't an
    integer is an error.
    """
    index = []
    for fn in os.listdir(gpxDir):
        if not fn.endswith(GPX_SUFFIX) or isReserved(fn):
            continue
        name = stem(fn)
        if not _INDEX_NAME.match(name):
            raise ValueError('buildTrackIndex: %s in %s is not a clip track (<index>.gpx)'
                             % (fn, gpxDir))
        index.append((int(name), fn))
    index.sort()
    return index


def _seed(state, fileName, track, report):
    # No valid endpoint yet: take this track's last point if it is a real fix.
    state = state._replace(bufferedName=fileName)
    if not track.hasPoints():
        report.warn('%s has no track points, skipped' % fileName)
        return state
    last = track.lastPoint()
    if isZeroFix(last):
        report.warn('%s ends without a GPS fix, skipped' % fileName)
        return state
    return state._replace(lastPoint=last, established=True)


def stitchStep(state, position, fileName, track, router, report=None):
    """
    Advance the walk by one track and return the new stitchState.
    router(origin, destination, position, (prevName, nextName)) is called
    when a link is needed and returns whether the link was written.
    """
    if report is None:
        report = runReport()
    if isReserved(fileName) or fileName in state.linked:
        return state
    if position == 0 or not state.established:
        assert state.established or isDefaultPoint(state.lastPoint)
        return _seed(state, fileName, track, report)

    if not track.hasPoints():
        report.warn('%s has no track points, no link from %s' % (fileName, state.bufferedName))
        return state._replace(bufferedName=fileName)

    destination = track.firstPoint()
    if isZeroFix(destination):
        report.warn('%s starts without a GPS fix, no link from %s'
                    % (fileName, state.bufferedName))
        return _seed(state._replace(lastPoint=DEFAULT_POINT, established=False),
                     fileName, track, report)

    names = (stem(state.bufferedName), stem(fileName))
    # the router reports gaps it couldn't fill
    router(state.lastPoint, destination, position, names)

    state = state._replace(bufferedName=fileName, linked=state.linked | {fileName})
    last = track.lastPoint()
    if isZeroFix(last):
        report.warn('%s ends without a GPS fix' % fileName)
        return state._replace(lastPoint=DEFAULT_POINT, established=False)
    return state._replace(lastPoint=last, established=True)


def stitchTracks(gpxDir, router, report=None, trackIndex=None):
    """
    Walk the clip tracks of gpxDir in index order and let router
    write a link for every gap between consecutive valid endpoints.
    Returns the final stitchState.
    """
    if report is None:
        report = runReport()
    if trackIndex is None:
        trackIndex = buildTrackIndex(gpxDir)
    state = INITIAL_STATE
    for position, (_, fn) in enumerate(trackIndex):
        track = readTrack(os.path.join(gpxDir, fn))
        state = stitchStep(state, position, fn, track, router, report)
    return state
