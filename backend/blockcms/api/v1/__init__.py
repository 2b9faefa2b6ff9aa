from flask import Blueprint

# Create the versioned blueprint
v1_bp = Blueprint("v1", __name__)

# Import route modules so they register with v1_bp
from . import pages
from . import menus
from . import posts
from . import categories
from . import users
from . import settings
from . import dashboard
