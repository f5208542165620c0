"""Python objects for the Jamf Pro API, with change tracking for partial updates"""
