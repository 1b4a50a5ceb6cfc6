"""Global test fixtures."""

import logfire

# Keep spans local; must run before the app module instruments FastAPI
logfire.configure(send_to_logfire=False, console=False)
