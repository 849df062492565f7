"""Application layer: interfaces, DTOs and the authentication flow."""
