"""
isoextract is a pure python library to read ISO9660 images and write their
directory tree and file contents out to the host filesystem.
"""
from .isoextract import IsoExtract  # NOQA
