"""Blog backend: users, posts, taxonomy, comments, reactions, media and audit logs."""
