"""Election client application: models, repositories, services and state."""
