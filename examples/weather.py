from tooltailor import convert


def get_current_weather(*, location, unit="celsius", api_key=None):
    """Get the current weather in a given location.

    @param location [String] The city and state, e.g., San Francisco, CA.
    @param unit [String] The unit of temperature.
    @values unit ["celsius", "fahrenheit"]
    @param api_key [String] The API key for the weather service.
    """
    # Function implementation goes here


function_schema = convert(get_current_weather)

print("Function Schema:")
print(function_schema)
