"""Domain types shared by the layout engine and the schedule views."""
