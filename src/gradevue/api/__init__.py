from gradevue.api import client
from gradevue.api import demo

from gradevue.api.client import (StudentVueClient, district_url_variants,
                                 element_to_dict, fetch_gradebook,
                                 is_auth_error, login_with_fallback,
                                 normalize_district_url,)
from gradevue.api.demo import (DEMO_CREDENTIALS, demo_gradebook,)

__all__ = ['DEMO_CREDENTIALS', 'StudentVueClient', 'client', 'demo',
           'demo_gradebook', 'district_url_variants', 'element_to_dict',
           'fetch_gradebook', 'is_auth_error', 'login_with_fallback',
           'normalize_district_url']
