"""sysfs device class backends."""
