from __future__ import annotations
import argparse, json, sys
from dataclasses import asdict
from scripture import Engine
from scripture import config as CFG


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Scripture reference CLI (Engine-backed)")
    p.add_argument("--bible", default=CFG.BIBLE_JSON, help="Bible JSON file")
    p.add_argument("--q", default=None, help="Text before the cursor to complete once")
    p.add_argument("--scan", default=None, help="Text file to scan for references ('-' for stdin)")
    p.add_argument("--repl", action="store_true", help="Interactive completion loop after load")
    p.add_argument("-n", type=int, default=20, help="Show at most N suggestions")
    p.add_argument("--json", action="store_true", help="Emit JSON rows")
    p.add_argument("--verbose", action="store_true", default=CFG.VERBOSE)

    args = p.parse_args(argv)
    if not (args.q is not None or args.scan or args.repl):
        p.error("nothing to do: pass --q, --scan or --repl")

    eng = Engine()
    try:
        try:
            eng.load(args.bible, verbose=args.verbose)
        except (FileNotFoundError, ValueError) as e:
            print(f"error: cannot load {args.bible}: {e}", file=sys.stderr)
            return 2

        def run_query(q: str):
            rows = eng.complete(q)
            if args.json:
                print(json.dumps([asdict(r) for r in rows], ensure_ascii=False, indent=2))
                return
            if not rows:
                print("(no suggestions)"); return
            print("#     Kind     Label")
            for r in rows[:args.n]:
                print(f"{r.sort_text:<5} {r.kind:<8} {r.label}")
            if len(rows) > args.n:
                print(f"... {len(rows) - args.n} more")

        def run_scan(path: str):
            if path == "-":
                text = sys.stdin.read()
            else:
                with open(path, "r", encoding="utf-8") as f:
                    text = f.read()
            rows = eng.references(text)
            if args.json:
                print(json.dumps([asdict(r) for r in rows], ensure_ascii=False, indent=2))
                return
            if not rows:
                print("(no references)"); return
            for r in rows:
                print(f"{r.span.start.line + 1}:{r.span.start.character + 1}  {r.label}")
                for line in r.content.splitlines():
                    print(f"    {line}")

        if args.q is not None:
            run_query(args.q)

        if args.scan:
            run_scan(args.scan)

        if args.repl:
            print("Type the text before the cursor (empty line to exit).")
            while True:
                try:
                    # keep trailing spaces: "John " asks for chapters
                    q = input("> ")
                except (EOFError, KeyboardInterrupt):
                    break
                if not q.strip():
                    break
                run_query(q)

        return 0
    finally:
        eng.shutdown()


if __name__ == "__main__":
    raise SystemExit(main())
