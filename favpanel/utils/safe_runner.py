"""
2025-10-18 décorateur des points d'entrée CLI.
"""

from collections.abc import Callable
from functools import wraps
import sys
import traceback
from typing import Any

from favpanel.models.exceptions import FavPanelError

INTERRUPTED = 130


def safe_main(func: Callable[..., Any]) -> Callable[..., Any]:
    """
    Exit with the int returned by `func` (None → 0).

    A `FavPanelError` exits 1 with its code and context, any other exception exits 1 with
    its traceback, Ctrl+C exits 130.
    """

    @wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        try:
            code = func(*args, **kwargs)
        except KeyboardInterrupt:
            sys.exit(INTERRUPTED)
        except FavPanelError as e:
            print(f"❌ {e} | ctx={e.ctx!r}", file=sys.stderr)
            sys.exit(1)
        except Exception as e:
            print(f"❌ Error caught by safe_main: {e}", file=sys.stderr)
            traceback.print_exc(file=sys.stderr)
            sys.exit(1)
        sys.exit(code or 0)

    return wrapper
