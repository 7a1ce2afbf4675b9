"""Person directory REST API: people, roles and user-role assignments."""
