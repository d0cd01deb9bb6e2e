"""Third-party services used by the client: routing and the support chatbot."""
