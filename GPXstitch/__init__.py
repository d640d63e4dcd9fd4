from .gpxTrack import gpxTrack, trackPoint, readTrack, writeTrack
from .stitchParms import stitchParms, readParmFile
from .goproRoute import goproRoute
