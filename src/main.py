"""Script de ejecución.

Por qué existe:
- Permite ejecutar la CLI con `python -m main` durante desarrollo.
- Mantiene un entrypoint simple además del script `genzaichi` del paquete.
"""

from __future__ import annotations

import sys

# Las respuestas de Nominatim (accept-language=ja) traen texto japonés; en
# terminales Windows cp1252 eso rompe con UnicodeEncodeError.
if sys.platform == "win32":
    sys.stdout.reconfigure(encoding="utf-8")
    sys.stderr.reconfigure(encoding="utf-8")

from cli.main import run


def main() -> None:
    run()


if __name__ == "__main__":
    main()
