"""Services Layer: orchestrates pure core rules over the injected stores."""
