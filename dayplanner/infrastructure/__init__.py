"""Infrastructure implementations of collaborator ports."""
