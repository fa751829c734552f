"""HTTP surface: FastAPI app, response models and scratch-file handling."""
