import pytest

from GPXstitch.gpxTrack import (DEFAULT_POINT, gpxTrack, isDefaultPoint, isZeroFix,
                                readTrack, trackPoint, writeTrack)

GOPRO2GPX_OUTPUT = b"""<?xml version="1.0" encoding="UTF-8"?>
<gpx xmlns="http://www.topografix.com/GPX/1/1" version="1.1" creator="gopro2gpx">
 <trk>
  <name>GOPR0042</name>
  <trkseg>
   <trkpt lat="31.6295000" lon="-7.9810800"><ele>466.123</ele><time>2022-04-02T10:00:00Z</time></trkpt>
   <trkpt lat="31.6301" lon="-7.98"><ele>470</ele></trkpt>
  </trkseg>
 </trk>
</gpx>
"""


def test_round_trip_keeps_coordinate_strings(tmp_path):
    points = [trackPoint('31.6295000', '-7.9810800', 466.5),
              trackPoint('31.63', '-7.98', 0.0),
              trackPoint('1e-5', '+2.50', None)]
    track = gpxTrack('clip', [points])
    fn = str(tmp_path / '0.gpx')
    writeTrack(track, fn)
    back = readTrack(fn)
    assert back == track
    assert [p.lat for p in back.firstSegment()] == ['31.6295000', '31.63', '1e-5']
    assert [p.lon for p in back.firstSegment()] == ['-7.9810800', '-7.98', '+2.50']
    assert back.firstSegment()[2].ele is None


def test_written_elevation_is_plain_number():
    xml = gpxTrack('t', [[trackPoint('1', '2', 0.0)]]).toXml()
    assert '<ele>0</ele>' in xml
    assert 'lat="1"' in xml and 'lon="2"' in xml


def test_reads_namespaced_gopro2gpx_output():
    track = gpxTrack.fromXml(GOPRO2GPX_OUTPUT, index=3)
    assert track.name == 'GOPR0042'
    assert track.index == 3
    assert track.firstPoint() == trackPoint('31.6295000', '-7.9810800', 466.123)
    assert track.lastPoint().lat == '31.6301'
    assert track.lastPoint().ele == 470.0


def test_track_without_points():
    track = gpxTrack.fromXml(b'<gpx><trk><name>x</name><trkseg></trkseg></trk></gpx>')
    assert not track.hasPoints()
    assert gpxTrack.fromXml(b'<gpx></gpx>').segments == []


def test_malformed_gpx_names_the_file(tmp_path):
    fn = tmp_path / '4.gpx'
    fn.write_text('<gpx><trk>')
    with pytest.raises(ValueError, match='4.gpx'):
        readTrack(str(fn))


def test_sentinel_predicates():
    assert isDefaultPoint(DEFAULT_POINT)
    assert not isDefaultPoint(trackPoint('0', '0'))
    assert isZeroFix(trackPoint('0', '0', 12.0))
    assert not isZeroFix(trackPoint('0', '7.1'))
    # exact string match, not numeric
    assert not isZeroFix(trackPoint('0.0', '0.0'))


def test_point_elevation_is_optional():
    p = trackPoint('1.5', '2.5')
    assert p.ele is None
    assert trackPoint._field_defaults == {'ele': None}
