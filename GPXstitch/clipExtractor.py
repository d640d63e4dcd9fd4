### Extract GPS tracks from GoPro clips.
###
### For every .mp4 in the source folder (oldest first):
###  * ffmpeg copies the GPMF telemetry stream into a raw .bin file
###  * gpmd2csv turns it into telemetry/<clip>.csv
###  * gopro2gpx turns it into gpxFiles/<i>.gpx, i = position of the clip
###  * the .bin file is deleted
### All three tools come from outside; any failure stops the run.
### gpmd2csv and gopro2gpx: https://github.com/JuanIrache/gopro-utils

from collections import namedtuple
import os
import os.path
import shutil
import subprocess

clip = namedtuple('clip', ['name', 'mtime'])

VIDEO_SUFFIX = '.mp4'


def listClips(sourceDir):
    """
    Video clips of sourceDir, sorted by modification time.
    Hidden files and anything that isn't .mp4 / .MP4 are ignored.
    """
    clips = []
    with os.scandir(sourceDir) as entries:
        for entry in entries:
            if entry.name.startswith('.') or not entry.is_file():
                continue
            if not entry.name.lower().endswith(VIDEO_SUFFIX):
                continue
            clips.append(clip(entry.name, entry.stat().st_mtime))
    clips.sort(key=lambda c: (c.mtime, c.name))
    return clips


def clipBaseName(clipName):
    if clipName.lower().endswith(VIDEO_SUFFIX):
        return clipName[:-len(VIDEO_SUFFIX)]
    return clipName


def resetDirectory(dirName):
    """Delete dirName and its content; it is created again when needed."""
    if os.path.isdir(dirName):
        shutil.rmtree(dirName)


def createFolder(dirName):
    os.makedirs(dirName, exist_ok=True)


def runTool(cmd):
    try:
        subprocess.run(cmd, check=True)
    except (OSError, subprocess.CalledProcessError) as e:
        raise RuntimeError('clipExtractor: %s failed: %s' % (' '.join(cmd), e)) from e


class clipExtractor:
    """
    Runs the external tools for one clip at a time.
    Paths to the tools default to whatever is on the PATH.
    """

    def __init__(self, sourceDir, gpxDir, telemetryDir, rawDir='./rawVideos',
                 ffmpegPath='ffmpeg', gpmd2csvPath='gpmd2csv', gopro2gpxPath='gopro2gpx',
                 gpmdStream='0:3', gpsAccuracy=500, report=None):
        self.sourceDir = sourceDir
        self.gpxDir = gpxDir
        self.telemetryDir = telemetryDir
        self.rawDir = rawDir
        self.ffmpegPath = ffmpegPath
        self.gpmd2csvPath = gpmd2csvPath
        self.gopro2gpxPath = gopro2gpxPath
        self.gpmdStream = gpmdStream
        self.gpsAccuracy = gpsAccuracy
        self.report = report

    def extractRaw(self, clipName, binFile):
        createFolder(self.rawDir)
        runTool([self.ffmpegPath, '-y', '-i', os.path.join(self.sourceDir, clipName),
                 '-codec', 'copy', '-map', self.gpmdStream, '-f', 'rawvideo', binFile])

    def extractCsv(self, binFile, csvName):
        createFolder(self.telemetryDir)
        runTool([self.gpmd2csvPath, '-i', binFile, '-o', os.path.join(self.telemetryDir, csvName)])

    def extractGpx(self, binFile, gpxName):
        createFolder(self.gpxDir)
        runTool([self.gopro2gpxPath, '-i', binFile, '-a', str(self.gpsAccuracy),
                 '-o', os.path.join(self.gpxDir, gpxName)])

    def extractClip(self, i, clipName):
        """
        Produce telemetry/<clip>.csv and gpxFiles/<i>.gpx for one clip.
        The GPX file is named after the clip's position, not its name:
        the stitcher relies on that.
        """
        if self.report is not None:
            self.report.info('extract data from : ' + clipName)
        base = clipBaseName(clipName)
        binFile = os.path.join(self.rawDir, base + '.bin')
        self.extractRaw(clipName, binFile)
        self.extractCsv(binFile, base + '.csv')
        gpxFile = str(i) + '.gpx'
        self.extractGpx(binFile, gpxFile)
        os.remove(binFile)
        if self.report is not None:
            self.report.addClip(clipName)
        return os.path.join(self.gpxDir, gpxFile)

    def extractAll(self, clips):
        return [self.extractClip(i, c.name) for i, c in enumerate(clips)]
