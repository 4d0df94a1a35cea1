# ratings_api/routers/__init__.py

# Esto expone los módulos para que "from ratings_api.routers import users" funcione
from . import auth
from . import ratings
from . import employees
from . import branches
from . import users
from . import public
