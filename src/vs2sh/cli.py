"""
Command-line interface.

    vs2sh -d dev.env -u user.env [-o vs.sh] [OPTIONS]

dev.env is the output of `env` (or `set`) captured inside a Visual Studio
Developer Command Prompt, user.env the same from a plain shell. The
generated profile can then be sourced from an sh-compatible shell to get
the Visual Studio command line tools.
"""

import argparse
import logging
import os
import sys
from typing import List, Optional

from vs2sh import __version__
from vs2sh.analyzer import analyze_profile, format_report
from vs2sh.backends import save_profile
from vs2sh.config import ConfigError, ProfileConfig, load_config
from vs2sh.dump import dump_versions, is_windows_host
from vs2sh.overrides import build_overrides
from vs2sh.parser import SnapshotEncodingError, parse_snapshot_file
from vs2sh.pathstyle import has_cygpath
from vs2sh.pipeline import StructuralInputError, build_profile_model
from vs2sh.serialization import model_to_yaml

logger = logging.getLogger("vs2sh")


def _readable_file(value: str) -> str:
    if os.path.isfile(value):
        if not os.access(value, os.R_OK):
            raise argparse.ArgumentTypeError(f"file '{value}' cannot be read")
        return os.path.realpath(value)
    raise argparse.ArgumentTypeError(f"file '{value}' does not exist")


def _existing_dir(value: str) -> str:
    if os.path.isdir(value):
        return os.path.realpath(value)
    raise argparse.ArgumentTypeError(f"directory '{value}' does not exist")


def _non_empty(value: str) -> str:
    if not value:
        raise argparse.ArgumentTypeError("empty value")
    return value


def build_arg_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="vs2sh",
        description="Create startup files for sh-compatible shells to allow "
                    "use of Visual Studio command line tools.",
    )
    parser.add_argument("-d", "--dev-env", type=_readable_file, metavar="FILENAME",
                        help="file containing variables from development environment")
    parser.add_argument("-u", "--user-env", type=_readable_file, metavar="FILENAME",
                        help="file containing variables from default environment")
    parser.add_argument("-o", "--output", type=_non_empty, default="vs.sh", metavar="FILENAME",
                        help="filename of generated profile file (default: vs.sh)")
    parser.add_argument("--sdk", type=_non_empty, metavar="VERSION",
                        help="generate profile to use specified VERSION of Windows SDK")
    parser.add_argument("--vctools", type=_non_empty, metavar="VERSION",
                        help="generate profile to use specified VERSION of Visual C tools")
    parser.add_argument("--vcredist", type=_non_empty, metavar="VERSION",
                        help="generate profile to use specified VERSION of Visual C redistributables")

    cygpath = parser.add_mutually_exclusive_group()
    cygpath.add_argument("--cygpath", dest="cygpath", action="store_true", default=None,
                         help="use cygpath in generated files "
                              "(default: use it if it was found on the system)")
    cygpath.add_argument("--no-cygpath", dest="cygpath", action="store_false",
                         help="do not use cygpath in generated files")

    parser.add_argument("-f", "--fast", action="store_true",
                        help="do not perform variable substitution")
    parser.add_argument("-c", "--config", metavar="FILENAME",
                        help="YAML configuration file")
    parser.add_argument("--model-out", metavar="FILENAME",
                        help="also write the profile model as YAML")
    parser.add_argument("--report", action="store_true",
                        help="print an analysis of the generated profile")

    dump = parser.add_argument_group("auxiliary output")
    dump.add_argument("--dump", action="store_true",
                      help="produce auxiliary output in addition to normal output")
    dump.add_argument("--dump-only", action="store_true",
                      help="produce auxiliary output only")
    dump.add_argument("--dump-dir", type=_existing_dir, metavar="DIRNAME",
                      help="directory where to write auxiliary files (default: current directory)")

    parser.add_argument("-v", "--verbose", action="count", default=0,
                        help="more logging (repeat for debug output)")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity > 1:
        level = logging.DEBUG
    logging.basicConfig(
        level=level,
        format="vs2sh: %(levelname)s: %(message)s",
        stream=sys.stderr,
    )


def resolve_config(args: argparse.Namespace) -> ProfileConfig:
    """Combine the configuration file (if any) with command-line flags."""
    config = load_config(args.config) if args.config else ProfileConfig()

    if args.cygpath is not None:
        config.convert_path_style = args.cygpath
    elif not args.config:
        config.convert_path_style = has_cygpath()

    if args.fast:
        config.fast = True

    config.overrides = list(config.overrides) + build_overrides(
        sdk=args.sdk, vctools=args.vctools, vcredist=args.vcredist
    )
    return config


def run(args: argparse.Namespace) -> int:
    config = resolve_config(args)

    dev = parse_snapshot_file(args.dev_env, config.path_variable, config.path_separator)
    user = parse_snapshot_file(args.user_env, config.path_variable, config.path_separator)

    if not args.dump_only:
        model = build_profile_model(dev, user, config)
        save_profile(model, args.output)

        if args.model_out:
            with open(args.model_out, 'w', encoding='utf-8') as f:
                f.write(model_to_yaml(model))

        if args.report:
            print(format_report(analyze_profile(model)))

    if args.dump or args.dump_only:
        if is_windows_host():
            dump_versions(dev, args.dump_dir or os.getcwd())
        else:
            logger.warning("ignoring --dump option - non-windows host")

    return 0


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_arg_parser()
    args = parser.parse_args(argv)

    if not args.user_env:
        parser.error("default environment file is not specified")
    if not args.dev_env:
        parser.error("development environment file is not specified")

    configure_logging(args.verbose)

    try:
        return run(args)
    except (ConfigError, SnapshotEncodingError, StructuralInputError) as e:
        logger.error(str(e))
        return 1


if __name__ == "__main__":
    sys.exit(main())
