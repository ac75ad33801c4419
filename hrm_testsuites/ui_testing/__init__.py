"""UI testing: framework, page objects, test cases and the real-browser suite."""
