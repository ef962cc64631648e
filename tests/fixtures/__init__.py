"""Mock device responses for the test suite."""
