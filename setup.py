from setuptools import setup


__version__ = '0.3'

setup(
    name='GPXstitch',
    version=__version__,
    install_requires=[
        'gpxpy',
        'requests',
        'pyyaml'
    ],
    extras_require={
        'test': ['pytest']
    },
    description='Stitch the GPS tracks of GoPro clips into one route.',
    keywords = ['GPS', 'GPX', 'GoPro', 'openrouteservice', 'bicycle'],
    packages=['GPXstitch'],
    scripts=['util/stitchGoproClips.py', 'util/mergeGPX.py'],
    classifiers = [
        "Programming Language :: Python :: 3",
        "Operating System :: OS Independent"
    ],
    include_package_data=True
)
