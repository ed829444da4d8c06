"""Body metrics domain.

Pure calculators turning anthropometric and biometric inputs into derived
metrics: BMI and waist-hip ratio, skinfold body composition, BMR across
published protocols, total energy expenditure and weight goal viability.
"""
