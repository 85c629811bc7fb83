#!/usr/bin/env python

import fire
from ._utils import log_params
from ._filter import filter_rdepth, filter_repeatability
from ._report import report_rdepth, report_repeatability


def cli():
    """
    Entry point for the dartqc command line interface.
    """
    fire.Fire()


if __name__ == "__main__":
    fire.Fire()
