### openrouteservice directions client: fetches the connector ("link")
### between the end of one clip track and the start of the next one.
###
### Main routine: constructor + fetchLink, like so:
### ors = openRouteService(apiKey, gpxDir)
### ors.fetchLink(lastPointOfClip3, firstPointOfClip4, 4, ('3', '4'))
### -> writes gpxDir/3To4.gpx

import os.path
import xml.etree.ElementTree as ET

import requests

from .gpxTrack import gpxTrack, trackPoint, localName, writeTrack
from .runReport import runReport

ORS_URL = 'https://api.openrouteservice.org/v2/directions/%s/gpx'
LINK_TRACK_NAME = 'openRouteService'


def parseRouteGpx(gpxData):
    """
    Convert the GPX returned by openrouteservice (a <rte> of <rtept>s
    with duration / distance / step extensions) into a track:
    one segment, same points in the same order, metadata dropped.
    Raises ValueError if gpxData isn't well-formed XML.
    """
    try:
        root = ET.fromstring(gpxData)
    except ET.ParseError as e:
        raise ValueError('parseRouteGpx: malformed route GPX (%s)' % e) from e
    points = []
    for rte in root:
        if localName(rte.tag) != 'rte':
            continue
        for rtept in rte:
            if localName(rtept.tag) == 'rtept':
                points.append(trackPoint(rtept.get('lat', ''), rtept.get('lon', '')))
    return gpxTrack(LINK_TRACK_NAME, [points])


def linkName(names):
    return names[0] + 'To' + names[1]


def removeLink(linkFile):
    # a link from an earlier run would otherwise end up in final.gpx
    if os.path.isfile(linkFile):
        os.remove(linkFile)


def requestBody(origin, destination):
    # Coordinates go out exactly as they were read from the clip tracks,
    # hence the hand-built JSON rather than json.dumps on floats.
    return '{"coordinates":[[%s,%s],[%s,%s]]}' % (
        origin.lon, origin.lat, destination.lon, destination.lat)


class openRouteService:
    def __init__(self, apiKey, gpxDir, profile='cycling-mountain', url=None,
                 timeout=30, report=None):
        self.apiKey = apiKey
        self.gpxDir = gpxDir
        self.profile = profile
        self.url = url if url is not None else ORS_URL % profile
        self.timeout = timeout
        self.report = report if report is not None else runReport()

    def __call__(self, origin, destination, index, names):
        return self.fetchLink(origin, destination, index, names)

    def fetchLink(self, origin, destination, index, names):
        """
        Request a route origin -> destination and save it as
        gpxDir/<names[0]>To<names[1]>.gpx.
        Returns True if the link was written.  Anything but HTTP 200
        (or no answer within self.timeout) leaves the gap open;
        that is reported, not raised.
        """
        link = linkName(names)
        linkFile = os.path.join(self.gpxDir, link + '.gpx')
        headers = {'Content-type': 'application/json',
                   'Authorization': self.apiKey}
        try:
            r = requests.post(self.url, data=requestBody(origin, destination),
                              headers=headers, timeout=self.timeout)
        except requests.RequestException as e:
            self.report.warn('no link %s (gap %i): routing request failed: %s'
                             % (link, index, e))
            removeLink(linkFile)
            return False
        with r:
            if r.status_code != 200:
                self.report.warn('no link %s (gap %i): openrouteservice answered HTTP %i'
                                 % (link, index, r.status_code))
                removeLink(linkFile)
                return False
            track = parseRouteGpx(r.content)
        writeTrack(track, linkFile)
        self.report.addLink(names[0] + ' -> ' + names[1])
        return True
