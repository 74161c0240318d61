"""PhotoGuesser: guess where your own photos were taken."""
