from decouple import config

SECRET_KEY = config("SECRET_KEY", default="your_secret_key")
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_MINUTES = config("ACCESS_TOKEN_EXPIRE_MINUTES", default=30, cast=int)

# Signed action links (installer) stay valid for a day, like host nonces
NONCE_LIFETIME_SECONDS = config("NONCE_LIFETIME_SECONDS", default=86400, cast=int)
