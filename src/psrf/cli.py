#!/usr/bin/env python3

""" Command line front end: Rhat table and dotplot from a csv file of draws """

import argparse
import sys
from pathlib import Path

import matplotlib.pyplot as plt
from codetiming import Timer
from loguru import logger

from .draws import read_draws
from .errors import PSRFError
from .plot import render_rhat_plot
from .rhat import compute_rhat, not_converged
from .settings import Settings


def setup_logging(verbose = 0, quiet = False):
    """ Send log messages to stderr, WARNING by default, INFO with -v and DEBUG with -vv """
    logger.remove()
    if quiet:
        return
    level = {0: "WARNING", 1: "INFO"}.get(verbose, "DEBUG")
    logger.add(sys.stderr, level = level, format = "{time:HH:mm:ss} {level} {message}")


def get_settings(argv):
    overrides = {
        "family": argv.family,
        "scaling": 0 if argv.no_scaling else argv.scaling,
        "greek": True if argv.greek else None,
        "burnin": argv.burnin,
        "thin": argv.thin,
        "threshold": argv.threshold,
        "output_rhat": argv.output_rhat,
        "output_plot": argv.output_plot,
    }
    if argv.settings_file:
        return Settings.from_yaml(argv.settings_file, **overrides)
    return Settings(**{k: v for k, v in overrides.items() if v is not None})


def run(argv):
    """ Read draws, compute Rhat, write the table and the plot. Returns the Rhat table """

    settings = get_settings(argv)
    logger.debug("settings: {}", vars(settings))

    with Timer("psrf", text = "Elapsed time: {:.2f} s", logger = logger.info):
        draws = read_draws(argv.draws, **settings.get_load_settings())
        result = compute_rhat(draws, family = settings.family)

        output_directory = Path(argv.output_directory)
        output_directory.mkdir(parents = True, exist_ok = True)
        result.to_csv(Path(output_directory, settings.output_rhat), index = False)
        logger.info("Rhat table written to {}", Path(output_directory, settings.output_rhat))

        if settings.output_plot:
            fig = render_rhat_plot(result, **settings.get_plot_settings())
            fig.savefig(Path(output_directory, settings.output_plot))
            plt.close(fig)
            logger.info("Rhat plot written to {}", Path(output_directory, settings.output_plot))

    flagged = not_converged(result, settings.threshold)
    if flagged:
        logger.warning("Rhat above {} for: {}", settings.threshold, ", ".join(flagged))
    return result


def parse_args(args = None):
    parser = argparse.ArgumentParser(description="Potential Scale Reduction Factors (Rhat) of MCMC draws.")
    parser.add_argument('draws',
                        help="A csv file with the draws, either long (Parameter, Chain, value) or wide (Chain plus one column per parameter)")
    parser.add_argument('--settings-file', '-s', dest='settings_file', default=None,
                        help="File with settings in Yaml. Command-line options take precedence.")
    parser.add_argument('--output_directory', '-o', default='.',
                        help="Output directory for resulting data (default = '.').")
    parser.add_argument('--family', '-f', default=None,
                        help="Name or regular expression of the family of parameters to use")
    parser.add_argument('--scaling', default=None, type=float,
                        help="Upper limit for the x-axis of the plot (default = 1.5)")
    parser.add_argument('--no-scaling', dest='no_scaling', action='store_true',
                        help="Do not scale the x-axis of the plot")
    parser.add_argument('--greek', action='store_true',
                        help="Parse parameter labels to get Greek letters")
    parser.add_argument('--burnin', default=None, type=int,
                        help="Number of initial iterations to discard in every chain (default = 0)")
    parser.add_argument('--thin', default=None, type=int,
                        help="Keep one iteration out of every THIN (default = 1)")
    parser.add_argument('--threshold', default=None, type=float,
                        help="Rhat above which a parameter is reported as not converged (default = 1.1)")
    parser.add_argument('--output_rhat', default=None,
                        help="File name on which to save the Rhat table (default = 'rhat.csv')")
    parser.add_argument('--output_plot', default=None,
                        help="File name on which to save the Rhat plot (default = 'rhat.png')")
    parser.add_argument('--verbose', '-v', default=0, action='count',
                        help="Print level.")
    parser.add_argument('--quiet', '-q', action='store_true',
                        help="No output")
    return parser.parse_args(args)


def main(args = None):
    argv = parse_args(args)
    setup_logging(argv.verbose, argv.quiet)
    try:
        run(argv)
    except (PSRFError, FileNotFoundError) as e:
        logger.error(str(e))
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
