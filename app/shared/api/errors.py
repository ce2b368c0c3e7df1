E_INTERNAL = "E_INTERNAL_ERROR"
E_INVALID_PARAMS = "E_INVALID_PARAMS"
E_BAD_API_KEY = "E_BAD_API_KEY"
E_RATE_LIMITED = "E_RATE_LIMITED"
