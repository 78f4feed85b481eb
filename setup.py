#!/usr/bin/env python
from __future__ import annotations

import setuptools

if __name__ == "__main__":
    if int(setuptools.__version__.split(".")[0]) < 61:
        print("Please upgrade setuptools to at least version 61.0.0")
        exit(1)

    setuptools.setup()
