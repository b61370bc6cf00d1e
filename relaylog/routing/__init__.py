"""relaylog record routing — threshold filtering and fan-out to sinks.

Sinks are pluggable targets: the console, an append-only local file, a
remote chat channel, or any custom sink implementing the BaseSink
protocol.  The DispatchEngine hands each accepted record to every enabled
sink as an independent fire-and-forget task.
"""
