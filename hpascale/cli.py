"""
hpascale command line

Usage:
  hpascale                              # show all HPAs in the current namespace
  hpascale -n shop --all --min 50%      # minimum = half of each maximum
  hpascale api worker --max 2x          # double the maximum of two HPAs
  hpascale -l tier=web --cpu 60         # CPU target of every HPA labelled tier=web
  hpascale --all --max 10 --dry-run     # log what would change, update nothing
"""

import argparse
import logging
import sys
from typing import Dict, List, Optional

from kubernetes.client.rest import ApiException

from hpascale import __version__
from hpascale.batch import BatchOptions, apply_batch
from hpascale.config import DEFAULT_KUBECONFIG, load_config, merge_overrides
from hpascale.config_validator import OUTPUT_FORMATS, LOG_FORMATS, ConfigurationError
from hpascale.display import HpaTable, make_console
from hpascale.expressions import ExpressionError
from hpascale.gauge import GaugeConfig
from hpascale.kube import HpaClient, load_kube_client, resolve_namespace
from hpascale.logging_config import get_logger, setup_structured_logging
from hpascale.strategy import InvalidArgumentsError, resolve_strategy

logger = logging.getLogger(__name__)


def parse_label(value: str) -> Dict[str, str]:
    """argparse type for key=value label filters"""
    key, sep, label_value = value.partition("=")
    if not sep or not key:
        raise argparse.ArgumentTypeError(f"Invalid label filter '{value}', expected key=value")
    return {key: label_value}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="hpascale",
        description="Adjust HorizontalPodAutoscaler bounds with absolute values, percentages or multipliers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__.split("Usage:", 1)[1] if __doc__ else None,
    )
    parser.add_argument("names", nargs="*", metavar="HPA", help="Names of specific HPAs to modify")
    parser.add_argument("--min", "--minimum", dest="minimum", help="Set minimum, e.g. 3, 50%% (of maximum) or 2x")
    parser.add_argument("--max", "--maximum", dest="maximum", help="Set maximum, e.g. 20, 50%% or 1.5x")
    parser.add_argument("--cpu", "--cpu-target", dest="cpu_target", help="Set CPU target utilization percentage")
    parser.add_argument("--info", action="store_true", help="Show information about the HPAs")
    parser.add_argument("--kubeconfig", help=f"Path to the kubeconfig file (default: $KUBECONFIG or {DEFAULT_KUBECONFIG})")
    parser.add_argument("-n", "--namespace", help="Namespace to modify HPAs in")
    parser.add_argument("--context", help="Context to use in kubeconfig")
    parser.add_argument("-l", "--label", dest="labels", type=parse_label, action="append", default=[],
                        metavar="KEY=VALUE", help="Label filters to select HPAs (repeatable)")
    parser.add_argument("--all", action="store_true", help="Modify all HPAs in the namespace")
    parser.add_argument("--dry-run", action="store_true", default=None, help="Log changes without updating")
    parser.add_argument("--output-format", choices=OUTPUT_FORMATS, help="Colour handling of the info table")
    parser.add_argument("--gauge-width", type=int, help="Width of the graphical scale")
    parser.add_argument("--log-level", help="DEBUG, INFO, WARNING or ERROR")
    parser.add_argument("--log-format", choices=LOG_FORMATS, help="Log line format")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


def merge_labels(labels: List[Dict[str, str]]) -> Dict[str, str]:
    merged = {}
    for label in labels:
        merged.update(label)
    return merged


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point, returns the process exit code"""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        config = merge_overrides(load_config(), {
            'kubeconfig': args.kubeconfig,
            'namespace': args.namespace,
            'context': args.context,
            'dry_run': args.dry_run,
            'log_level': args.log_level,
            'log_format': args.log_format,
            'output_format': args.output_format,
            'gauge_width': args.gauge_width,
        })
    except ConfigurationError as e:
        parser.error(str(e))

    setup_structured_logging(
        log_level=config.log_level,
        json_format=config.log_format == "json",
        extra_fields={
            'component': 'hpascale',
            'version': __version__
        }
    )

    labels = merge_labels(args.labels)
    info = args.info or (not args.all and not args.names and not labels)

    strategy = None
    if not info:
        try:
            strategy = resolve_strategy(args.cpu_target, args.minimum, args.maximum)
        except (ExpressionError, InvalidArgumentsError) as e:
            logger.error(str(e))
            return 1
    elif args.cpu_target or args.minimum or args.maximum:
        logger.warning("No HPAs selected, showing information only. Name HPAs, use -l or --all to modify")

    try:
        api = load_kube_client(config.kubeconfig, config.context)
        namespace = resolve_namespace(config.namespace, config.kubeconfig, config.context)
    except ConfigurationError as e:
        logger.error(str(e))
        return 1

    log = get_logger(__name__, {'namespace': namespace})
    hpa_client = HpaClient(api, namespace)

    try:
        records = hpa_client.select(args.names, labels)
    except ApiException as e:
        log.error(f"Failed to list HPAs in {namespace}: {e.reason or e}")
        return 1

    if info:
        HpaTable(GaugeConfig(width=config.gauge_width)).print(records, make_console(config.output_format))
        return 0

    if not records:
        log.warning(f"No HPAs matched in {namespace}")
        return 0

    result = apply_batch(strategy, records, hpa_client.persist, BatchOptions(dry_run=config.dry_run))
    error = result.error
    if error is not None:
        log.error(str(error))
        return 1

    verb = "Would update" if config.dry_run else "Updated"
    log.info(f"{verb} {len(result.outcomes)} HPA(s) with {strategy}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
