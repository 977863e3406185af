from flask_wtf.csrf import CSRFProtect

# Create CSRF protection instance.
# Every POST to the product form must carry the token rendered
# into the template with csrf_token().
csrf = CSRFProtect()
