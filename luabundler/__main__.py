import argparse
import sys

from . import VERSION, color_print
from .bundler import LuaBundler
from .exceptions import BundlerException

DESCRIPTION = "Bundles a tree of Lua/Luau modules into a single, self-contained script."


def main(argv=None):
    parser = argparse.ArgumentParser(
        prog="luabundler", description=DESCRIPTION,
        epilog="example: python -m luabundler ./src main.luau ./bundle/output.luau")

    parser.add_argument("base_dir", help="The base directory to start bundling from (e.g. ./src).")
    parser.add_argument("entry_file", help="The entry file, relative to the base directory (e.g. main.luau).")
    parser.add_argument("output_file", help="The output file (e.g. ./bundle/output.luau).")
    parser.add_argument("--version", action="version", version=f"%(prog)s {VERSION}")
    parser.add_argument("--extensions", default=".lua,.luau",
                        help="Extensions probed, in order, for requires without one (comma-separated).")
    parser.add_argument("--no-type-warnings", action="store_false", dest="warn_on_types",
                        help="Do not warn about type declarations found in modules.")
    parser.add_argument("--no-color", action="store_false", dest="color", help="Disable colored output.")

    # Header metadata
    parser.add_argument("--module-version", default="", help="Version written in the bundle header.")
    parser.add_argument("--author", default="", help="Author written in the bundle header.")
    parser.add_argument("--description", default="", help="Description written in the bundle header.")
    parser.add_argument("--project-website", help="Project website written in the bundle header.")
    parser.add_argument("--additional-headers", help="Additional headers (e.g., 'Key1=Value1,Key2=Value2').")

    # Generated shim
    parser.add_argument("--loader-name", default="import", help="Name of the generated bundle loader function.")
    parser.add_argument("--bridge-name", default="game_require", help="Name of the generated host bridge function.")
    parser.add_argument("--bridge-identity", type=int, default=2,
                        help="Thread identity set while the host loader runs.")
    parser.add_argument("--restore-identity", type=int, default=7,
                        help="Thread identity restored after the host loader returns.")

    args = parser.parse_args(args=argv)
    color_print.set_enabled(args.color)

    additional_headers = {}
    if args.additional_headers:
        for item in args.additional_headers.split(','):
            key, sep, value = item.partition("=")
            if not key or not sep:
                parser.error(f"invalid additional header {item!r}, expected Key=Value")
            additional_headers[key] = value

    extensions = [ext if ext.startswith('.') else f".{ext}" for ext in args.extensions.split(',') if ext]

    bundler = LuaBundler(
        base_dir=args.base_dir,
        entry_file=args.entry_file,
        output_file=args.output_file,
        extensions=extensions,
        warn_on_types=args.warn_on_types,
        module_version=args.module_version,
        author=args.author,
        description=args.description,
        project_website=args.project_website,
        additional_headers=additional_headers,
        loader_name=args.loader_name,
        bridge_name=args.bridge_name,
        bridge_identity=args.bridge_identity,
        restore_identity=args.restore_identity,
    )

    try:
        bundler.bundle_files()
    except (BundlerException, OSError) as e:
        color_print.error(str(e))
        sys.exit(1)
    return bundler


if __name__ == "__main__":
    main()
