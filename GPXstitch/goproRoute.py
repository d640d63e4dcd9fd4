### Create one GPX route from a folder of GoPro clips.
###
### Location has to be enabled on the GoPro, otherwise the clips carry
### no GPS data and there is nothing to stitch.
###
### Steps:
###  * extract telemetry/<clip>.csv and gpxFiles/<i>.gpx from every clip (clipExtractor)
###  * link the last fix of each clip to the first fix of the next one
###    with a route from openrouteservice, saved as gpxFiles/<i>To<j>.gpx (gpxStitcher)
###  * merge everything into gpxFiles/final.gpx (gpxMerge)

from .clipExtractor import clipExtractor, listClips, resetDirectory
from .gpxMerge import mergeFinal
from .gpxStitcher import buildTrackIndex, stitchTracks
from .openRouteService import openRouteService
from .runReport import runReport


def goproRoute(parms, skipExtraction=False, report=None):
    """
    Run the whole pipeline for a stitchParms instance.
    skipExtraction: stitch and merge the GPX files already in parms.gpxDir
    (the clips aren't touched and gpxDir isn't wiped).
    Returns the runReport.
    """
    if report is None:
        report = runReport()
    if not skipExtraction:
        clips = listClips(parms.sourceDir)
        if len(clips) == 0:
            raise ValueError('goproRoute: no .mp4 clips in %s' % parms.sourceDir)
        resetDirectory(parms.gpxDir)
        extractor = clipExtractor(parms.sourceDir, parms.gpxDir, parms.telemetryDir,
                                  rawDir=parms.rawDir, ffmpegPath=parms.ffmpegPath,
                                  gpmd2csvPath=parms.gpmd2csvPath,
                                  gopro2gpxPath=parms.gopro2gpxPath,
                                  gpmdStream=parms.gpmdStream, gpsAccuracy=parms.gpsAccuracy,
                                  report=report)
        extractor.extractAll(clips)

    trackIndex = buildTrackIndex(parms.gpxDir)
    report.info('create link between GoPro GPX files (%i tracks)' % len(trackIndex))
    router = openRouteService(parms.apiKey, parms.gpxDir, profile=parms.routingProfile,
                              url=parms.routingUrl, timeout=parms.routingTimeout,
                              report=report)
    stitchTracks(parms.gpxDir, router, report=report, trackIndex=trackIndex)

    report.info('merge GPX and GPX links')
    finalFile = mergeFinal(parms.gpxDir, mergeCommand=parms.mergeCommand, report=report)
    report.info('route written to ' + finalFile)
    return report
