#!/usr/bin/env python
# -*- coding: utf-8 -*-

from setuptools import setup, Command
import re
import sys

# Can't just import mdtoc, because dependencies have to be satisfied
# first. So, we'll "grep" for the VERSION.

source = "mdtoc/__init__.py"

version = None
version_re = re.compile(r'''^\s*VERSION\s*=\s*['"]?([\d.]+)["']?.*$''')
with open(source) as f:
    for line in f:
        m = version_re.match(line)
        if m:
            version = m.group(1)
            break

if not version:
    sys.stderr.write("Can't find version in {0}\n".format(source))
    sys.exit(1)

def run_cmd(command_string):
    import subprocess
    try:
        print(f'+ {command_string}')
        rc = subprocess.call(command_string, shell=True)
        if rc < 0:
            print(f'Command terminated by signal {-rc}',
                  file=sys.stderr)
    except OSError as e:
        print(f'Command failed: {e}', file=sys.stderr)


class TestCommand(Command):
    description = 'run all tests'

    user_options = []

    def initialize_options(self):
        pass

    def finalize_options(self):
        pass

    def run(self):
        run_cmd("python -m pytest tests")

setup(
    name='mdtoc',
    packages=['mdtoc'],
    version=version,
    description='Generate a table of contents in markdown documents, in place',
    cmdclass={
        'test': TestCommand
    },
    python_requires='>=3.7',
    install_requires=[
        'docopt >= 0.6.2',
        'grizzled-python >= 2.2.0',
        'PyYAML >= 5.1',
        'termcolor >= 1.1.0',
    ],
    extras_require={
        'test': ['pytest'],
    },
    entry_points={
        'console_scripts': [
            'mdtoc=mdtoc:main'
        ]
    },
    license="Apache License, Version 2.0",
    classifiers=[],
)
