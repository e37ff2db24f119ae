"""Middleware helpers: security headers, trailing-slash handling and origin matching."""