# Album art retrieval and tag verification helpers
