"""SQL queries for fleet data retrieval."""


class Queries:
    """Repository for SQL queries."""
    
    # Ordering is significant: the scheduler breaks ties by input order
    GET_SITE_TRUCKS = """
        SELECT 
            truck_id, battery_capacity_kwh, current_charge_percent
        FROM t_truck
        WHERE site_id = %s
            AND active = true
        ORDER BY display_order ASC, truck_id ASC
    """
    
    GET_SITE_CHARGERS = """
        SELECT 
            charger_id, rate_kw
        FROM t_charger
        WHERE site_id = %s
            AND active = true
        ORDER BY display_order ASC, charger_id ASC
    """
    
    GET_SITE_TIME_HORIZON = """
        SELECT time_horizon_hours
        FROM t_site_schedule_config
        WHERE site_id = %s
        ORDER BY created_date_time DESC
        LIMIT 1
    """
