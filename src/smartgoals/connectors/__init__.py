"""Front-ends that drive an AppSession (console REPL)."""
