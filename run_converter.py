import argparse
import logging
import sys
from pathlib import Path

from cs2ts.converter import Converter, TranslationError, load_ast

def main(argv=None):
    parser = argparse.ArgumentParser(description="Convert C# source (or its AST JSON) to TypeScript.")
    parser.add_argument("input", help="Path to a .cs file, or an AST .json file.")
    parser.add_argument("out_ts", nargs="?", default=None, help="Output TypeScript file path (default: stdout).")
    parser.add_argument(
        "--ast-json",
        action="store_true",
        help="Treat the input as AST JSON even without a .json suffix.",
    )
    parser.add_argument(
        "--strict",
        action="store_true",
        help="Fail on the first node kind that has no translator.",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Print conversion statistics to stderr after the run.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging.")
    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    in_path = Path(args.input)
    try:
        if args.ast_json or in_path.suffix.lower() == ".json":
            ast = load_ast(str(in_path))
        else:
            # tree-sitter 只在需要解析 C# 源码时加载
            from cs2ts.frontend import parse_csharp
            ast = parse_csharp(in_path.read_text(encoding="utf-8"))
        conv = Converter(ast, strict=args.strict)
        content = conv.run()
    except (TranslationError, OSError, ValueError) as e:
        print(f"error: {e}", file=sys.stderr)
        return 1

    if args.out_ts:
        Path(args.out_ts).write_text(content + "\n", encoding="utf-8")
        print(f"✅ 完成 → {args.out_ts}", file=sys.stderr)
    else:
        sys.stdout.write(content + "\n")

    if args.report:
        print(conv.report(), file=sys.stderr)
    return 0

if __name__ == "__main__":
    sys.exit(main())
