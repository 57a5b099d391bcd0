#!/usr/bin/env python3
"""
Script para iniciar o interpretador BASIC (console) ou a IDE web
"""
import argparse
import logging
import sys

from config import Settings


def run_console():
    from session import BasicSession
    BasicSession().repl(sys.stdin)


def run_web(host, port):
    import uvicorn
    print("🚀 BASIC Interpreter IDE")
    print("=" * 50)
    print(f"🔄 Iniciando servidor FastAPI em http://{host}:{port}")
    try:
        uvicorn.run("main:app", host=host, port=port)
    except KeyboardInterrupt:
        print("\n👋 Servidor interrompido. Até logo!")


def main(argv=None):
    settings = Settings.from_env()
    arg_parser = argparse.ArgumentParser(description="Interpretador BASIC com números de linha")
    arg_parser.add_argument("--web", action="store_true", help="inicia a IDE web em vez do console")
    arg_parser.add_argument("--host", default=settings.host)
    arg_parser.add_argument("--port", type=int, default=settings.port)
    arg_parser.add_argument("-v", "--verbose", action="store_true", help="log em nível DEBUG")
    args = arg_parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    if args.web:
        run_web(args.host, args.port)
    else:
        run_console()

if __name__ == "__main__":
    main()
