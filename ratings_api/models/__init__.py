# ratings_api/models/__init__.py

# 1. Base de datos (Origen de la clase declarativa)
from ratings_api.database import Base

# 2. Sucursales
from .organization import Branch

# 3. Empleados y Calificaciones
from .employees import Employee, Rating, utc_now

# 4. Usuarios, Roles y vínculos con sucursales
from .users import User, UserBranch, Role, AdminAccess, ClientAccess, UserAuthorization
