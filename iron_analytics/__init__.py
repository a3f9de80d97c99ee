"""Iron Analytics — training-volume reducers over workout history."""
