def init_app(app):
    """Initialize all API blueprints."""
    from facility_api.api.facilities import bp as facilities_bp
    from facility_api.api.hashtags import bp as hashtags_bp
    from facility_api.api.health import bp as health_bp
    from facility_api.api.reviews import bp as reviews_bp
    from facility_api.api.users import bp as users_bp

    app.register_blueprint(users_bp)
    app.register_blueprint(facilities_bp)
    app.register_blueprint(reviews_bp)
    app.register_blueprint(hashtags_bp)
    app.register_blueprint(health_bp)
