### Run parameters, read from a YAML file.
###
### Example (parms.yaml):
###   sourceDir: /Volumes/GOPRO/trip/day4
###   apiKeyFile: ors.secret
###   gopro2gpxPath: /opt/gopro-utils/bin/gopro2gpx
###   gpmd2csvPath: /opt/gopro-utils/bin/gpmd2csv

import os.path

import yaml

DEFAULTS = {
    'rawDir': './rawVideos',
    'ffmpegPath': 'ffmpeg',
    'gpmd2csvPath': 'gpmd2csv',
    'gopro2gpxPath': 'gopro2gpx',
    'gpmdStream': '0:3',
    'gpsAccuracy': 500,
    'mergeCommand': None,
    'routingUrl': None,
    'routingProfile': 'cycling-mountain',
    'routingTimeout': 30,
}


class stitchParms:
    def __init__(self, parms=None, **keywords):
        """
        parms: dictionary as read from the parameter file;
        keywords override single entries.
        """
        parms = dict(parms or {})
        parms.update(keywords)
        if not parms.get('sourceDir'):
            raise ValueError("stitchParms: 'sourceDir' is required")
        for key, value in DEFAULTS.items():
            setattr(self, key, parms.get(key, value))
        self.sourceDir = parms['sourceDir']
        self.telemetryDir = parms.get('telemetryDir') or os.path.join(self.sourceDir, 'telemetry')
        self.gpxDir = parms.get('gpxDir') or os.path.join(self.sourceDir, 'gpxFiles')
        self.apiKey = parms.get('apiKey')
        self.apiKeyFile = parms.get('apiKeyFile')
        if not self.apiKey:
            if not self.apiKeyFile:
                raise ValueError("stitchParms: need 'apiKey' or 'apiKeyFile' for openrouteservice")
            self.apiKey = readApiKey(self.apiKeyFile)

    def __repr__(self):
        # keep the key out of logs
        return 'stitchParms(sourceDir=%r, gpxDir=%r, routingProfile=%r)' % (
            self.sourceDir, self.gpxDir, self.routingProfile)


def readApiKey(apiKeyFile):
    with open(apiKeyFile) as f:
        lines = f.read().strip().split('\n')
    if not lines[0].strip():
        raise ValueError('stitchParms: %s is empty' % apiKeyFile)
    return lines[0].strip()


def readParmFile(parmFile, **keywords):
    """
    Read parameter file (YAML format)
    Required:
    * sourceDir (folder with the GoPro clips)
    * apiKey or apiKeyFile (openrouteservice key; file: key on the first line)
    Optional:
    * gpxDir, telemetryDir (default: inside sourceDir), rawDir
    * ffmpegPath, gpmd2csvPath, gopro2gpxPath (default: found on the PATH)
    * gpmdStream (ffmpeg -map argument; default 0:3), gpsAccuracy (default 500)
    * mergeCommand (path to gpxmerge; default: merge with gpxpy)
    * routingProfile (default cycling-mountain), routingUrl, routingTimeout [s]
    """
    with open(parmFile, 'r') as f:
        try:
            parms = yaml.safe_load(f)
        except yaml.YAMLError as exc:
            print(exc)
            raise
    if parms is None:
        parms = {}
    if not isinstance(parms, dict):
        raise ValueError('stitchParms: %s does not hold a mapping' % parmFile)
    return stitchParms(parms, **keywords)
