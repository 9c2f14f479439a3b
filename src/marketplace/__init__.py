"""Food-ordering marketplace API.

Bakeries and restaurants publish products, customers place orders, and
vendor owners and admins drive each order through its lifecycle. Sign-in is
passwordless: users authenticate with a one-time code delivered by SMS.
"""

__version__ = "0.1.0"
