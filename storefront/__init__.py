"""Storefront order submission: client-side submission workflow and server-side order persistence."""
