import os.path
import runpy
import subprocess
import sys

import gpxpy
import pytest

from GPXstitch import gpxMerge
from GPXstitch.gpxMerge import mergeFinal, mergeOrder, resolveOrderKey


def test_resolve_order_key():
    assert resolveOrderKey('12.gpx') == (12, True)
    assert resolveOrderKey('3To4.gpx') == (3, False)
    assert resolveOrderKey('12To13') == (12, False)
    assert resolveOrderKey('final.gpx') == (0, False)
    assert resolveOrderKey('') == (0, False)


def test_merge_order():
    assert mergeOrder(['2.gpx', '10.gpx', '3To4.gpx', '1.gpx']) == \
        ['1.gpx', '2.gpx', '3To4.gpx', '10.gpx']


def test_clip_track_before_its_link():
    names = ['1To2.gpx', '2.gpx', '0To1.gpx', '1.gpx', '0.gpx']
    assert mergeOrder(names) == ['0.gpx', '0To1.gpx', '1.gpx', '1To2.gpx', '2.gpx']
    assert mergeOrder(list(reversed(names))) == mergeOrder(names)


def test_merge_final_in_process(tmp_path, writeClipTrack):
    for name in ['2', '0To1', '1', '0', '1To2']:
        writeClipTrack(tmp_path, name, [('1.5', '2.5'), ('1.6', '2.6')], trackName=name)
    (tmp_path / 'final.gpx').write_text('left over from the last run')
    finalFile = mergeFinal(str(tmp_path))
    assert finalFile == os.path.join(str(tmp_path), 'final.gpx')
    with open(finalFile) as f:
        merged = gpxpy.parse(f)
    assert [t.name for t in merged.tracks] == ['0', '0To1', '1', '1To2', '2']
    assert sum(len(t.segments) for t in merged.tracks) == 5


def test_merge_final_with_command(tmp_path, writeClipTrack, monkeypatch):
    for name in ['1', '0', '0To1']:
        writeClipTrack(tmp_path, name, [('1', '2')])
    calls = []
    monkeypatch.setattr(gpxMerge.subprocess, 'run', lambda cmd, **kw: calls.append(cmd))
    finalFile = mergeFinal(str(tmp_path), mergeCommand='/opt/gpxmerge')
    d = str(tmp_path)
    assert calls == [['/opt/gpxmerge', '-o', finalFile,
                      os.path.join(d, '0.gpx'), os.path.join(d, '0To1.gpx'), os.path.join(d, '1.gpx')]]
    # empty placeholder until the merger writes it
    assert os.path.getsize(finalFile) == 0


def test_merge_command_failure_is_fatal(tmp_path, writeClipTrack, monkeypatch):
    writeClipTrack(tmp_path, '0', [('1', '2')])

    def failing(cmd, **kw):
        raise subprocess.CalledProcessError(2, cmd)
    monkeypatch.setattr(gpxMerge.subprocess, 'run', failing)
    with pytest.raises(RuntimeError, match='gpxmerge'):
        mergeFinal(str(tmp_path), mergeCommand='gpxmerge')


def test_merge_final_needs_files(tmp_path):
    with pytest.raises(ValueError):
        mergeFinal(str(tmp_path))


def test_same_file_name_in_two_folders(tmp_path, writeClipTrack):
    for day, name in [('dayB', 'B'), ('dayA', 'A')]:
        (tmp_path / day).mkdir()
        writeClipTrack(tmp_path / day, '0', [('1', '2')], trackName=name)
    fileA = str(tmp_path / 'dayA' / '0.gpx')
    fileB = str(tmp_path / 'dayB' / '0.gpx')
    assert mergeOrder([fileB, fileA]) == [fileA, fileB]
    out = str(tmp_path / 'out.gpx')
    gpxMerge.mergeFiles([fileB, fileA], out)
    with open(out) as f:
        assert [t.name for t in gpxpy.parse(f).tracks] == ['A', 'B']


def test_merge_script_keeps_every_input(tmp_path, writeClipTrack, monkeypatch):
    for day, name in [('dayA', 'A'), ('dayB', 'B')]:
        (tmp_path / day).mkdir()
        writeClipTrack(tmp_path / day, '0', [('1', '2')], trackName=name)
    writeClipTrack(tmp_path / 'dayA', '0To1', [('1', '2')], trackName='link')
    out = str(tmp_path / 'out.gpx')
    script = os.path.join(os.path.dirname(os.path.dirname(__file__)), 'util', 'mergeGPX.py')
    monkeypatch.setattr(sys, 'argv', [script, out, str(tmp_path / 'dayA' / '0To1.gpx'),
                                      str(tmp_path / 'dayA' / '0.gpx'), str(tmp_path / 'dayB' / '0.gpx')])
    runpy.run_path(script, run_name='__main__')
    with open(out) as f:
        assert [t.name for t in gpxpy.parse(f).tracks] == ['A', 'B', 'link']


def test_merge_order_key_uses_file_name():
    assert gpxMerge.mergeOrderKey('/x/3To4.gpx') == (3, True, '3To4.gpx', '/x/3To4.gpx')
    assert gpxMerge.mergeOrderKey('/b/2.gpx') < gpxMerge.mergeOrderKey('/a/10.gpx')
