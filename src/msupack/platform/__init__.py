"""Platform services shared by features: filesystem, HTTP and logging."""
