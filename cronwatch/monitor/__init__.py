"""The alerter interface, alerting backends, alerter wrappers and the monitoring loop."""