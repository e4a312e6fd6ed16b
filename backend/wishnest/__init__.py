"""WishNest backend: wishlists shared between friends, with hidden reservations."""
