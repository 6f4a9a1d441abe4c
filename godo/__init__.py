"""godo: build a Go command package and replace this process with it."""
