# models_bootstrap.py
# every model module must be imported before Base.metadata is used
from company import models as _company_models
from department import models as _department_models
from employee import models as _employee_models
