import os.path

import pytest

from GPXstitch.gpxTrack import gpxTrack, trackPoint, writeTrack


@pytest.fixture
def writeClipTrack():
    """Write gpxDir/<name>.gpx with one segment of (lat, lon) pairs."""
    def write(gpxDir, name, coords, trackName='gopro'):
        points = [trackPoint(lat, lon, 0.0) for lat, lon in coords]
        fileName = os.path.join(str(gpxDir), name + '.gpx')
        writeTrack(gpxTrack(trackName, [points]), fileName)
        return fileName
    return write
