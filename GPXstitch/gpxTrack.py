### GPX track model for GoPro route stitching
### 2026/10/19

# Reads and writes single-track GPX files without touching the coordinates:
# lat/lon are kept as the literal strings found in the file, so a track that
# is written and read back compares equal string by string.
# gpxpy would turn them into floats, which is fine for the final merge
# (see gpxMerge) but not for the endpoint checks done while stitching.

from collections import namedtuple
import xml.etree.ElementTree as ET

GPX_NAMESPACE = 'http://www.topografix.com/GPX/1/1'

DEFAULT_COORD = 'default'  # no coordinate seen yet
ZERO_COORD = '0'  # gopro2gpx writes this when the GPS had no fix

trackPoint = namedtuple('trackPoint', ['lat', 'lon', 'ele'], defaults=(None,))

DEFAULT_POINT = trackPoint(DEFAULT_COORD, DEFAULT_COORD, 0.0)


def isDefaultPoint(p):
    return p.lat == DEFAULT_COORD and p.lon == DEFAULT_COORD


def isZeroFix(p):
    """Recorded point without a usable GPS fix (lat and lon both "0")."""
    return p.lat == ZERO_COORD and p.lon == ZERO_COORD


def localName(tag):
    # '{namespace}trkpt' -> 'trkpt'
    return tag.rsplit('}', 1)[-1]


def _children(element, name):
    return [c for c in element if localName(c.tag) == name]


def _formatEle(ele):
    text = repr(float(ele))
    if text.endswith('.0'):
        text = text[:-2]
    return text


class gpxTrack:
    """
    One GPX track: a name and a list of segments, each segment
    a list of trackPoints.  index is the clip sequence number
    the track was extracted from (None for routed links).
    """

    def __init__(self, name='', segments=None, index=None):
        self.name = name
        self.segments = segments if segments is not None else []
        self.index = index

    def __eq__(self, other):
        if not isinstance(other, gpxTrack):
            return NotImplemented
        return self.name == other.name and self.segments == other.segments

    def __repr__(self):
        return 'gpxTrack(%r, %i segments)' % (self.name, len(self.segments))

    def firstSegment(self):
        if len(self.segments) == 0:
            return []
        return self.segments[0]

    def hasPoints(self):
        return len(self.firstSegment()) > 0

    def firstPoint(self):
        return self.firstSegment()[0]

    def lastPoint(self):
        return self.firstSegment()[-1]

    @classmethod
    def fromXml(cls, text, index=None):
        """
        Parse GPX text.  Only the first <trk> is read; element names are
        matched without their namespace, so both plain files and
        gopro2gpx output (GPX 1.1 namespace) load.
        Raises ValueError on malformed XML.
        """
        try:
            root = ET.fromstring(text)
        except ET.ParseError as e:
            raise ValueError('gpxTrack: malformed GPX (%s)' % e) from e
        track = cls(index=index)
        trks = _children(root, 'trk')
        if len(trks) == 0:
            return track
        trk = trks[0]
        names = _children(trk, 'name')
        if names and names[0].text:
            track.name = names[0].text
        for seg in _children(trk, 'trkseg'):
            points = []
            for pt in _children(seg, 'trkpt'):
                ele = None
                eles = _children(pt, 'ele')
                if eles and eles[0].text:
                    ele = float(eles[0].text)
                points.append(trackPoint(pt.get('lat', ''), pt.get('lon', ''), ele))
            track.segments.append(points)
        return track

    def toXml(self):
        gpx = ET.Element('gpx', {'version': '1.1', 'creator': 'GPXstitch',
                                 'xmlns': GPX_NAMESPACE})
        trk = ET.SubElement(gpx, 'trk')
        ET.SubElement(trk, 'name').text = self.name
        for seg in self.segments:
            trkseg = ET.SubElement(trk, 'trkseg')
            for p in seg:
                trkpt = ET.SubElement(trkseg, 'trkpt', {'lat': p.lat, 'lon': p.lon})
                if p.ele is not None:
                    ET.SubElement(trkpt, 'ele').text = _formatEle(p.ele)
        ET.indent(gpx, space=' ')
        return ET.tostring(gpx, encoding='unicode')


def readTrack(fileName, index=None):
    with open(fileName, 'rb') as f:
        content = f.read()
    try:
        return gpxTrack.fromXml(content, index=index)
    except ValueError as e:
        raise ValueError('%s: %s' % (fileName, e)) from e


def writeTrack(track, fileName):
    with open(fileName, 'w') as out:
        out.write('<?xml version="1.0" encoding="UTF-8"?>\n')
        out.write(track.toXml())
        out.write('\n')
