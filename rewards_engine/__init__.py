"""Activity rewards and streak engine"""
