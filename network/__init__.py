"""City/road graph model, validation and errors."""
