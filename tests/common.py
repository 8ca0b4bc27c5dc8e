BASE_URL = "http://auth.test"
