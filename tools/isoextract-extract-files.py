#!/usr/bin/python3

# Copyright (C) 2026  The isoextract authors

# This library is free software; you can redistribute it and/or
# modify it under the terms of the GNU Lesser General Public
# License as published by the Free Software Foundation;
# version 2.1 of the License.

# This library is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the GNU
# Lesser General Public License for more details.

# You should have received a copy of the GNU Lesser General Public
# License along with this library; if not, write to the Free Software
# Foundation, Inc., 51 Franklin Street, Fifth Floor, Boston, MA  02110-1301  USA

'''
The main code for the isoextract-extract-files tool, which writes the whole
directory tree of an ISO out to a directory on the host.
'''

import argparse
import logging
import os
import sys
import time

import isoextract
from isoextract import isoextractexception

GIGABYTE = 1024 * 1024 * 1024


def parse_arguments():
    '''
    A function to parse all of the arguments passed to the executable.

    Parameters:
     None.
    Returns:
     An ArgumentParser object with the parsed command-line arguments.
    '''
    parser = argparse.ArgumentParser()
    parser.add_argument('-o', '--outdir', help='Directory to extract into (default: <iso name>_extracted_<timestamp>)', action='store', default=None)
    parser.add_argument('-q', '--quiet', help='Do not print a line for every extracted file', action='store_true')
    parser.add_argument('-v', '--verbose', help='Enable debug logging', action='store_true')
    parser.add_argument('iso', help='ISO to extract', action='store')
    return parser.parse_args()


def default_outdir(iso_path):
    '''
    A function to come up with an output directory name for an ISO.

    Parameters:
     iso_path - The path to the ISO being extracted.
    Returns:
     The name of a directory in the current working directory.
    '''
    base = os.path.splitext(os.path.basename(iso_path))[0]
    return '%s_extracted_%s' % (base, time.strftime('%Y%m%d_%H%M%S'))


def print_summary(iso_size, total, outdir):
    '''
    A function to print how much was extracted.  The ratio is only reported;
    directory records, padding and unreferenced sectors mean it is never 1.

    Parameters:
     iso_size - The size of the ISO in bytes.
     total - The number of file bytes extracted.
     outdir - The directory the files went to.
    Returns:
     Nothing.
    '''
    ratio = 0.0
    if iso_size:
        ratio = float(total) / iso_size

    print('')
    print('Extraction Summary')
    print('Original ISO size: %.3f GB (%d bytes)' % (float(iso_size) / GIGABYTE, iso_size))
    print('Total extracted size: %.3f GB (%d bytes)' % (float(total) / GIGABYTE, total))
    print('Extraction ratio: %.4f (%.2f%%)' % (ratio, ratio * 100))
    print('Output folder: %s' % (outdir))


def main():
    '''
    The main function for this executable that does the work of extracting
    the ISO given the parameters specified by the user.
    '''
    args = parse_arguments()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING,
                        format='%(levelname)s:%(name)s:%(message)s')

    outdir = args.outdir
    if outdir is None:
        outdir = default_outdir(args.iso)

    def _report(path, length):
        print('Extracted: %s (%d bytes)' % (path, length))

    progress = None
    if not args.quiet:
        progress = _report

    try:
        with isoextract.IsoExtract() as iso:
            iso.open(args.iso)
            iso_size = iso.get_iso_size()
            total = iso.extract(outdir, progress=progress)
    except (isoextractexception.IsoExtractException, OSError) as err:
        print('Error: %s' % (err), file=sys.stderr)
        return 1

    print_summary(iso_size, total, outdir)
    return 0


if __name__ == "__main__":
    sys.exit(main())
