"""
Command line front end::

    davsession copy SOURCEURL TARGETURL [--source-username ...]
    davsession delete URL [--username U --password P]
    davsession getprops URL [--depth 0|1|infinity]
    davsession makecollection URL
    davsession move SOURCEURL TARGETURL
    davsession put FILE URL
    davsession caldav-report URL

Property documents and reports are written to stdout as XML.
"""
import argparse
import logging
import sys

import requests

from davsession import __version__
from davsession import commands
from davsession.lib import error
from davsession.session import xml_to_string

log = logging.getLogger("davsession")

BANNER = (
    "davsession version %s\n"
    "davsession comes with ABSOLUTELY NO WARRANTY.\n"
    "This is free software, and you are welcome to redistribute it\n"
    "under certain conditions.\n" % __version__
)


def _add_credentials(parser, prefix="", target="URL"):
    parser.add_argument(
        "--%susername" % prefix,
        default="",
        metavar="USERNAME",
        help="username for %s" % target,
    )
    parser.add_argument(
        "--%spassword" % prefix,
        default="",
        metavar="PASSWORD",
        help="password for %s" % target,
    )


def _init_command_line_options(argv=None):
    parser = argparse.ArgumentParser(
        prog="davsession",
        description="WebDAV and CalDAV client",
        formatter_class=argparse.RawTextHelpFormatter,
    )
    parser.add_argument(
        "-V", "--version", action="version", version="%(prog)s " + __version__
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="increment verbosity by one (-vv for debug output)",
    )
    parser.add_argument(
        "--timeout", type=float, default=None, help="response timeout in seconds"
    )
    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    p = sub.add_parser("copy", help="Copy props and data from one location to another")
    p.add_argument("url", metavar="SOURCEURL")
    p.add_argument("url2", metavar="TARGETURL")
    _add_credentials(p, "source-", "source URL")
    _add_credentials(p, "target-", "target URL")

    p = sub.add_parser("delete", help="Delete props and data")
    p.add_argument("url", metavar="URL")
    _add_credentials(p)

    p = sub.add_parser("getprops", help="Fetch props and output them to stdout")
    p.add_argument("url", metavar="URL")
    p.add_argument(
        "--depth", choices=("0", "1", "infinity"), default=None, help="depth"
    )
    _add_credentials(p)

    p = sub.add_parser("makecollection", help="Make a new collection")
    p.add_argument("url", metavar="URL")
    _add_credentials(p)

    p = sub.add_parser(
        "move",
        help="Move props and data from one location to another in the same DAV space",
    )
    p.add_argument("url", metavar="SOURCEURL")
    p.add_argument("url2", metavar="TARGETURL")
    _add_credentials(p)

    p = sub.add_parser("put", help="Put file to URL")
    p.add_argument("file", metavar="FILE")
    p.add_argument("url", metavar="URL")
    _add_credentials(p)

    p = sub.add_parser("caldav-report", help="Get CalDAV report")
    p.add_argument("url", metavar="URL")
    _add_credentials(p)

    return parser.parse_args(argv)


def dispatch(args) -> None:
    session_kwargs = {}
    if args.timeout is not None:
        session_kwargs["timeout"] = args.timeout

    if args.command == "copy":
        commands.copy(
            args.url,
            args.url2,
            args.source_username,
            args.source_password,
            args.target_username,
            args.target_password,
            **session_kwargs,
        )
    elif args.command == "delete":
        commands.delete(args.url, args.username, args.password, **session_kwargs)
    elif args.command == "getprops":
        tree = commands.getprops(
            args.url, args.username, args.password, args.depth, **session_kwargs
        )
        sys.stdout.write(xml_to_string(tree))
    elif args.command == "makecollection":
        commands.makecollection(
            args.url, args.username, args.password, **session_kwargs
        )
    elif args.command == "move":
        commands.move(args.url, args.url2, args.username, args.password, **session_kwargs)
    elif args.command == "put":
        with open(args.file, "rb") as f:
            body = f.read()
        commands.put(args.url, body, args.username, args.password, **session_kwargs)
    elif args.command == "caldav-report":
        tree = commands.report(args.url, args.username, args.password, **session_kwargs)
        sys.stdout.write(xml_to_string(tree))


def run(argv=None) -> int:
    args = _init_command_line_options(argv)
    sys.stderr.write(BANNER + "\n")
    if args.verbose:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        log.addHandler(handler)
        log.setLevel(logging.DEBUG if args.verbose > 1 else logging.INFO)
    try:
        dispatch(args)
    except error.DAVError as e:
        sys.stderr.write("davsession: %s\n" % e)
        return 1
    except requests.exceptions.RequestException as e:
        sys.stderr.write("davsession: transport error: %s\n" % e)
        return 2
    return 0


def main() -> None:
    sys.exit(run())


if __name__ == "__main__":
    main()
