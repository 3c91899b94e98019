"""Command-line interface for AWS Search Tool."""

import argparse
import sys

import argcomplete
from botocore.exceptions import BotoCoreError, NoCredentialsError

from . import core
from .config import DEFAULT_OUTPUT_FORMAT, default_tag_columns
from .exceptions import AmbiguousNarrowing, UnsupportedOutputFormat, UpstreamFailure
from .formatters import format_output, supported_formats, validate_output_format
from .utils import create_session, debug_print, get_client, set_debug_enabled

QUERY_HELP = "ambiguous search on name, id or tags. if set comma, search OR"


def output_completer(prefix, parsed_args, **kwargs):
    """Autocomplete output format names"""
    return [f for f in supported_formats() if f.startswith(prefix)]


def determine_tag_columns(tag_columns, show_all_tags, kind):
    """Determine which tag columns to show - user specified or defaults"""
    if tag_columns or show_all_tags:
        debug_print(f"Using user-specified tag columns: {tag_columns}, all={show_all_tags}")
        return tag_columns

    default_columns = default_tag_columns(kind)
    if default_columns:
        debug_print(f"Applying default tag columns for {kind}: {default_columns}")
        return default_columns

    debug_print(f"No tag columns (user or default) for {kind}")
    return None


def _add_query(parser, exact=False):
    group = parser.add_mutually_exclusive_group() if exact else parser
    group.add_argument("-q", "--query", help=QUERY_HELP)
    if exact:
        group.add_argument("-e", "--exq", dest="exact_query", help="search by name exactly")
        parser.add_argument("--ids", help="query with instance ids. `i-` can be omitted")


def _add_tag_columns(parser):
    parser.add_argument(
        "-T",
        "--tag-columns",
        help="comma separated list of tags presented as columns. Tags are case-sensitive.",
    )
    parser.add_argument("--show-all-tags", action="store_true", help="Show all tags as columns")


def run_instance(args, client):
    if args.view in ("ids", "id"):
        return core.search_instance_ids(client, args.query, args.exact_query, args.ids)
    if args.view in ("ips", "ip"):
        return core.search_instance_ips(client, args.query, args.exact_query, args.ids)
    return core.search_instances(
        client,
        args.query,
        args.exact_query,
        args.ids,
        determine_tag_columns(args.tag_columns, args.show_all_tags, "instance"),
        args.show_all_tags,
    )


def run_asg(args, client):
    if args.view in ("activities", "act"):
        return core.search_auto_scaling_activities(client, args.query)
    if args.view in ("instances", "inst"):
        return core.search_auto_scaling_instances(client, args.query)
    return core.search_auto_scaling_groups(
        client,
        args.query,
        determine_tag_columns(args.tag_columns, args.show_all_tags, "asg"),
        args.show_all_tags,
    )


def run_tg(args, client):
    if args.view in ("health", "ip"):
        return core.search_target_health(client, args.query)
    return core.search_target_groups(
        client,
        args.query,
        determine_tag_columns(args.tag_columns, args.show_all_tags, "tg"),
        args.show_all_tags,
    )


def build_parser():
    parser = argparse.ArgumentParser(
        prog="awssearch",
        description="Search EC2 instances, Auto Scaling Groups and Target Groups by name or tag",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  awssearch instance info -q api,web -T Env,Role
  awssearch instance ids --ids 0abc123,i-0def456
  awssearch asg info -q spot --show-all-tags
  awssearch asg activities -q spot-api
  awssearch tg info -q api -o json
  awssearch tg health -q api-tg
        """,
    )
    parser.add_argument("-d", "--debug", action="store_true", help="Enable debug output")
    parser.add_argument("--region", help="AWS region to use for requests")
    parser.add_argument("--profile", help="AWS profile to use for requests")
    output_arg = parser.add_argument(
        "-o",
        "--output",
        default=DEFAULT_OUTPUT_FORMAT,
        help=f"json or a tabulate table format (default: {DEFAULT_OUTPUT_FORMAT})",
    )
    output_arg.completer = output_completer  # type: ignore[attr-defined]

    kinds = parser.add_subparsers(dest="kind", metavar="KIND")
    kinds.required = True

    instance = kinds.add_parser("instance", aliases=["ec2"], help="search EC2 instances")
    instance.set_defaults(service="ec2", run=run_instance)
    instance_views = instance.add_subparsers(dest="view", metavar="VIEW")
    instance_views.required = True
    for name, aliases, text in (
        ("info", [], "display basic info"),
        ("ids", ["id"], "display instance ids and names"),
        ("ips", ["ip"], "display private ips and names"),
    ):
        view = instance_views.add_parser(name, aliases=aliases, help=text)
        _add_query(view, exact=True)
        if name == "info":
            _add_tag_columns(view)

    asg = kinds.add_parser("asg", help="search Auto Scaling Groups")
    asg.set_defaults(service="autoscaling", run=run_asg)
    asg_views = asg.add_subparsers(dest="view", metavar="VIEW")
    asg_views.required = True
    for name, aliases, text in (
        ("info", [], "display basic info"),
        ("activities", ["act"], "display activities"),
        ("instances", ["inst"], "display instances"),
    ):
        view = asg_views.add_parser(name, aliases=aliases, help=text)
        _add_query(view)
        if name == "info":
            _add_tag_columns(view)

    tg = kinds.add_parser("tg", help="search ELB Target Groups")
    tg.set_defaults(service="elbv2", run=run_tg)
    tg_views = tg.add_subparsers(dest="view", metavar="VIEW")
    tg_views.required = True
    for name, aliases, text in (
        ("info", [], "display basic info"),
        ("health", ["ip"], "display target ips, ports and health"),
    ):
        view = tg_views.add_parser(name, aliases=aliases, help=text)
        _add_query(view)
        if name == "info":
            _add_tag_columns(view)

    return parser


def main(argv=None):
    parser = build_parser()
    argcomplete.autocomplete(parser)
    args = parser.parse_args(argv)

    set_debug_enabled(args.debug)

    try:
        output_format = validate_output_format(args.output)
    except UnsupportedOutputFormat as e:
        print(f"ERROR: {e}", file=sys.stderr)
        print(f"Supported formats: {', '.join(supported_formats())}", file=sys.stderr)
        sys.exit(1)

    try:
        session = create_session(region=args.region, profile=args.profile)
        debug_print(f"Created session with region={args.region}, profile={args.profile}")
        client = get_client(args.service, session)
        headers, rows = args.run(args, client)
        print(format_output(headers, rows, output_format))
    except AmbiguousNarrowing as e:
        debug_print(f"Narrowing matched {e.count} resources")
        print(e)
    except UpstreamFailure as e:
        if isinstance(e.error, NoCredentialsError):
            print("ERROR: AWS credentials not found. Configure credentials first.", file=sys.stderr)
        else:
            print(f"ERROR: AWS API call failed: {e}", file=sys.stderr)
        sys.exit(1)
    except BotoCoreError as e:
        # raised while building the session or client, e.g. ProfileNotFound, NoRegionError
        print(f"ERROR: Could not set up AWS client: {e}", file=sys.stderr)
        sys.exit(1)
    except KeyboardInterrupt:
        print("\nOperation cancelled by user.", file=sys.stderr)
        sys.exit(1)


if __name__ == "__main__":
    main()
