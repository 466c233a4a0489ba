import io
import setuptools

VERSION='0.1.0'

setuptools.setup(name='isoextract',
                 version=VERSION,
                 description='Pure python ISO9660 extraction library',
                 long_description=io.open('README.md', encoding='UTF-8').read(),
                 long_description_content_type='text/markdown',
                 license='LGPLv2',
                 classifiers=['Development Status :: 3 - Alpha',
                              'Intended Audience :: Developers',
                              'License :: OSI Approved :: GNU Lesser General Public License v2 (LGPLv2)',
                              'Natural Language :: English',
                              'Programming Language :: Python :: 3',
                 ],
                 keywords='iso9660 iso ecma119 extract',
                 packages=['isoextract'],
                 python_requires='>=3.6',
                 extras_require={'test': ['pytest', 'pycdlib']},
                 scripts=['tools/isoextract-extract-files.py'],
)
