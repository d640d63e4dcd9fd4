### Collects what happened during a stitching run.
### Soft failures (dead clips, routing errors) don't stop the run,
### so they are printed as they happen and listed again at the end.


class runReport:
    def __init__(self, quiet=False):
        self.quiet = quiet
        self.warnings = []
        self.links = []
        self.clips = []

    def info(self, message):
        if not self.quiet:
            print(message)

    def warn(self, message):
        self.warnings.append(message)
        if not self.quiet:
            print('Warning: ' + message)

    def addClip(self, clipName):
        self.clips.append(clipName)

    def addLink(self, linkName):
        self.links.append(linkName)
        self.info('link : ' + linkName)

    def summary(self):
        lines = ['%i clips extracted, %i links created, %i warnings'
                 % (len(self.clips), len(self.links), len(self.warnings))]
        for w in self.warnings:
            lines.append('  * ' + w)
        return '\n'.join(lines)

    def printSummary(self):
        print(self.summary())
