# models_bootstrap.py
from company import models as _company_models
from location import models as _location_models
from application import models as _application_models
from role import models as _role_models
from user import models as _user_models
from equipment import models as _equipment_models
from certificate import models as _certificate_models
