def normalize_integration(integration):
    # Integrations carry no per-language columns
    return integration.to_dict()
