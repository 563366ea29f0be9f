"""Allow ``python -m pyforestry``."""
from .main import main

raise SystemExit(main())
