"""Business Logic Services.

This package contains all service modules that implement the core
business logic of WishNest.

Service Categories:
- Identity: user lookup, signup, login (user_service, auth_service)
- Friendship graph: requests, answers, removal, listings (friendship_service)
- Visibility: who may see and act on whose wishlist (visibility)
- Wishlist/Item store: wishlist and item CRUD (wishlist_service, item_service)
- Reservations: race-safe claim/release of an item's slot (reservation_service)

Cross-cutting:
- exceptions: typed error kinds, mapped to HTTP only in wishnest.api.errors
- metrics: Prometheus counters
"""
